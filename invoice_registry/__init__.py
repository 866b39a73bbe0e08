"""Invoice registry: role-gated REST API with stateless token authentication."""

__version__ = "0.1.0"
