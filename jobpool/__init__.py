"""Run shell jobs on a fixed pool of worker threads."""
