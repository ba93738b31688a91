"""interflow presentation layer."""
