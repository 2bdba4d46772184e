"""HTTP API for the novel platform admin console."""
