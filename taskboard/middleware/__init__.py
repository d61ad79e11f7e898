from .security_middleware import SecurityMiddleware

__all__ = ['SecurityMiddleware']
