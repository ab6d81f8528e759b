"""Sample application whose messages and handlers the tests describe."""
