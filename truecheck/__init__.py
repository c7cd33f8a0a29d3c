"""TrueCheck: multi-model consensus for AI-generated media detection."""
