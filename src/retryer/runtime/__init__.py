"""Runtime: the retry engine and the machinery it runs on (cancellation, logging)."""
