"""HTTP layer: error mapping, access policy and versioned routers."""
