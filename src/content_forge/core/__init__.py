"""Domain records and pipeline data types."""
