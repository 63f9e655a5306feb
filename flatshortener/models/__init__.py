from flatshortener.models.short_url_model import ShortURLModel


__all__ = ['ShortURLModel']
