"""
Services around the game engine: the arcade catalogue, submission
validation and the HTTP score client.
"""
