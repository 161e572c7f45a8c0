"""REST API coverage measured from recorded requests against a Swagger schema."""

__version__ = "0.1.0"
