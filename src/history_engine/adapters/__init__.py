"""Host adapters for history managers."""
