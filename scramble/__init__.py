"""Memory Scramble — remember the order, then find the buttons again."""
