from abc import ABC, abstractmethod
from uuid import UUID


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_qr_invitation(
        self,
        to_address: str,
        guest_name: str,
        qr_image_data_url: str,
        qr_code_url: str,
        attendee_id: UUID | None = None,
    ) -> str | None:
        """Send the accepted-guest invitation with the check-in QR code.

        Returns the provider message id when the transport has one.
        """
        pass
