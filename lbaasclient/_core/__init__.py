"""Internal building blocks: transport, link models and validators."""
