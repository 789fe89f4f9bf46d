from abc import ABC, abstractmethod

from quotebot.domain.entities.quote import Quote


class QuoteDocumentPort(ABC):
    @abstractmethod
    def render(self, quote: Quote) -> str:
        """Render an accepted quote. Returns a reference (path or URL) to the document."""
        raise NotImplementedError
