from .document_sampler import MongoDocumentSampler

__all__ = ["MongoDocumentSampler"]
