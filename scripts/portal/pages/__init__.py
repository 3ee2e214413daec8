"""Portal pages, one module per route."""
