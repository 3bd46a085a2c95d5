"""
Services around the game core: configuration, tick scheduling, sessions and replays.
"""
