from linkvault.services.mapping_service import UrlMappingService


__all__ = [
    'UrlMappingService',
]
