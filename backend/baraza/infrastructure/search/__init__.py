from .elasticsearch_index import ElasticsearchIndex

__all__ = ["ElasticsearchIndex"]
