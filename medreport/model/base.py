from abc import ABC, abstractmethod

from medreport.model.models import ModelProbe


class BaseModelClient(ABC):
    """Contract for provider-specific text-generation clients."""

    provider: str = ""

    @property
    @abstractmethod
    def model(self) -> str:
        """Name of the model requests are sent to."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send the prompt as the sole user content and return the raw reply.

        A single attempt is made. The reply is returned unmodified.

        Raises:
            ModelUnreachableError: if the endpoint cannot be reached.
            ModelTimeoutError: if no answer arrives within the timeout.
            ModelBadResponseError: if the endpoint answers with an error.
        """

    @abstractmethod
    def probe(self) -> ModelProbe:
        """Check endpoint reachability with a short timeout. Never raises."""

    def close(self) -> None:
        """Release any connections held by the client."""
