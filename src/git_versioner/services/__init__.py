"""Services that read repository state for version computation."""
