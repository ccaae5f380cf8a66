"""VisionClient — abstract base for image analysis backends."""
from abc import ABC, abstractmethod

from vision_batch.models import AnalysisFailed, AnalysisResult, ImageReference


class VisionClient(ABC):
    @abstractmethod
    async def analyze(self, ref: ImageReference) -> AnalysisResult | AnalysisFailed:
        """Analyze one image by reference. Returns AnalysisFailed instead of raising."""
        ...
