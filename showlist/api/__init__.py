"""HTTP surface: dependencies, middleware, request models and routers."""
