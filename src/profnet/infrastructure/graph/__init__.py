"""NetworkX view over connection edges."""
