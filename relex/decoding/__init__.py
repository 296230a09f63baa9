from .decoder import RelationDecoder
