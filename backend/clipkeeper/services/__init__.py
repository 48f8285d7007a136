from clipkeeper.services.ai_service import AIService
from clipkeeper.services.auth_service import AuthService
from clipkeeper.services.ingest_service import IngestService
from clipkeeper.services.metadata_service import MetadataService
from clipkeeper.services.quota_service import QuotaService
from clipkeeper.services.recommendation_service import RecommendationService

__all__ = [
    "AIService",
    "AuthService",
    "IngestService",
    "MetadataService",
    "QuotaService",
    "RecommendationService",
]
