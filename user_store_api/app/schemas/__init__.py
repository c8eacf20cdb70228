"""
Pydantic schema definitions and request decoding.

``user`` holds the request and response models; ``requests`` turns a
raw JSON body into one of those models after checking its top-level
shape.
"""
