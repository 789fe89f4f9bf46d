from abc import ABC, abstractmethod


class TranscriberPort(ABC):
    @abstractmethod
    def transcribe(self, media_id: str) -> str:
        """
        Turn a voice note into text.

        Raises TranscriptionUnavailable when the media cannot be fetched or transcribed.
        """
        raise NotImplementedError
