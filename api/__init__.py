"""HTTP API for the Law Firm AI Grader."""
