"""
YouGotListings proxy: validated, cached access to the YGL listings API.
"""
