"""Key persistence and database logging bridge for triton service groups."""
