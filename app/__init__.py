"""Trip plan generation service."""
