"""
Channel CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Channel persistence operations
"""

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.channel_model import ChannelModel


class ChannelCRUD(BaseCRUD[ChannelModel]):
    """CRUD operations for ChannelModel."""

    def __init__(self) -> None:
        """Initialize ChannelCRUD with ChannelModel."""
        super().__init__(ChannelModel)


channel_crud = ChannelCRUD()
