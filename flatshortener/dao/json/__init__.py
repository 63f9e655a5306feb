from flatshortener.dao.json.document_schema import StoreDocumentSchema
from flatshortener.dao.json.mixins import JsonFileMixin, StoreState
from flatshortener.dao.json.short_url_json_dao import ShortURLJsonDAO


__all__ = [
    'StoreDocumentSchema',
    'JsonFileMixin',
    'StoreState',
    'ShortURLJsonDAO',
]
