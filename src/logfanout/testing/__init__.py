"""Testing helpers – in-memory fakes for the storage port and subscribers."""
