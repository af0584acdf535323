"""Interview agent with two-tier (short-term + long-term) conversation memory."""
