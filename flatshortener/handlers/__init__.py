from flatshortener.handlers.context import HandlerContext


__all__ = ['HandlerContext']
