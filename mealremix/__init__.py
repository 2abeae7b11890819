"""A random recipe viewer with saved favourites and AI remixes."""
