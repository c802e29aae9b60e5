"""HTTP gateway: bearer authentication and versioned routers."""
