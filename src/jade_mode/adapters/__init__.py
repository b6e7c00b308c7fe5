"""Host adapters for the Jade mode."""
