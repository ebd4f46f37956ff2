"""Core logic: resource rendering, viewer state and the LMS client."""
