"""CareerConnect job-board client: search, apply, and profile flows."""
