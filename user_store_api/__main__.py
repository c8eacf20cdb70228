from user_store_api.run import main

main()
