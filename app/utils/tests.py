from fastapi import FastAPI


def create_test_app(routers, middlewares=None) -> FastAPI:
    """
    Create a FastAPI test application with the given routers and middlewares.

    Rate limiting and the error handlers are set up the same way as in the
    server, so error bodies match production.

    Args:
        routers: A router, or a list of routers, to include in the app.
        middlewares: Optional list of (middleware_class, config_dict) tuples.

    Returns:
        FastAPI: A configured FastAPI application.

    Example:
        app = create_test_app([router1, router2], middlewares=[(MiddlewareClass, config_dict)])
    """
    # Create a fresh app
    app = FastAPI()

    # Imported here so that importing this helper does not load the server
    from api.dependencies.rate_limits import setup_rate_limiter
    from server.exception_handlers import setup_exception_handlers

    setup_rate_limiter(app)
    setup_exception_handlers(app)

    # Add any additional middlewares
    if middlewares:
        for middleware_class, middleware_config in middlewares:
            app.add_middleware(middleware_class, **middleware_config)

    # Include the routers
    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router)

    return app
