from abc import ABC, abstractmethod

from quotebot.domain.entities.extracted_entity import ExtractedEntity


class EntityExtractorPort(ABC):
    @abstractmethod
    def extract(self, text: str) -> list[ExtractedEntity]:
        """
        Extract typed entity candidates from free text.

        Requirements:
        - Every returned item is a validated ExtractedEntity
        - May return several entities of the same kind (e.g. multiple materials)
        - Return an empty list when nothing is found

        Raises:
            ExtractionUpstreamError: provider unreachable or timed out
            ExtractionContractError: provider answered with an unusable payload
        """
        raise NotImplementedError
