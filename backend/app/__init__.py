"""Legal-Lens Pro backend."""
