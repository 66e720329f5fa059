from linkvault.dao.base.url_mapping_base_dao import UrlMappingBaseDAO, PutResult
from linkvault.dao.base.url_cache_base_dao import UrlCacheBaseDAO


__all__ = [
    'UrlMappingBaseDAO',
    'UrlCacheBaseDAO',
    'PutResult',
]
