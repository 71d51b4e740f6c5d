"""Planning, enrichment and chat agents for the Jharkhand trip planner."""
