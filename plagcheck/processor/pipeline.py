from abc import ABC, abstractmethod
from dataclasses import dataclass

from plagcheck.processor.models import Fingerprint, UploadRequest
from plagcheck.storage.models import StoredDocument


@dataclass(slots=True)
class UploadContext:
    request: UploadRequest
    category: str
    file_path: str | None = None
    fingerprint: Fingerprint | None = None
    document: StoredDocument | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: UploadContext) -> UploadContext:
        raise NotImplementedError
