from ..core.record import Message
from .base import EntityService
from .endpoints import query

STORE_NAME = "messages"


class MessageService(EntityService[Message]):
    @query
    def get_attachment_url(self, record_id: str) -> str:
        return self._require(record_id).attachment_url
