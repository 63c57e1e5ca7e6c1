import html
from dataclasses import dataclass
from typing import Protocol


class InvitationWording(Protocol):
    couple_names: str
    event_date: str
    event_location: str


@dataclass
class EmailTemplates:
    QR_INVITATION_SUBJECT = "You're Invited - Your RSVP is Confirmed!"
    QR_INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="margin: 0; padding: 20px; background-color: #fafafa;">
        <div style="max-width: 500px; margin: 0 auto; padding: 32px 24px; background: #fff; border-radius: 16px; border: 1px solid #eee; font-family: Georgia, serif;">
            <div style="text-align: center; margin-bottom: 24px;">
                <div style="font-size: 13px; letter-spacing: 2px; color: #888;">TOGETHER WITH THEIR FAMILIES</div>
                <div style="font-size: 2.1em; margin: 18px 0; color: #222;">{couple_names}</div>
                <div style="font-size: 13px; letter-spacing: 1px; color: #888; margin-bottom: 18px;">
                    REQUEST THE PLEASURE OF YOUR COMPANY<br/>AT THE CEREMONY OF THEIR WEDDING
                </div>
                <div style="font-size: 15px; color: #222; margin-bottom: 12px;">{event_date}</div>
                <div style="font-size: 13px; color: #888; margin-bottom: 18px;">{event_location}</div>
                <div style="font-size: 13px; color: #888; font-style: italic;">Reception to Follow</div>
            </div>

            <p style="color: #222;">Dear {guest_name},</p>
            <p style="color: #222;">Your RSVP has been confirmed. We can't wait to celebrate with you!</p>

            <div style="text-align: center; margin: 32px 0 0 0;">
                <div style="font-size: 15px; color: #222; margin-bottom: 8px;">Show this QR code at the entrance:</div>
                <img src="{qr_image_data_url}" alt="QR Code" style="width: 160px; height: 160px; border-radius: 12px; border: 1px solid #eee; background: #fafafa;" />
                <div style="font-size: 12px; color: #888; margin-top: 8px;">
                    Can't see the code? <a href="{qr_code_url}" style="color: #bc6c25;">Open it here</a>.
                </div>
                <div style="font-size: 12px; color: #888; margin-top: 8px;">
                    If you lose this email, you can still be verified with your name or email.
                </div>
            </div>
        </div>
    </body>
    </html>
    """

    QR_INVITATION_TEXT = """
    Dear {guest_name},

    Your RSVP has been confirmed!

    {couple_names} request the pleasure of your company at the ceremony of their wedding.

    - Date: {event_date}
    - Location: {event_location}

    Show your QR code at the entrance. You can open it here:
    {qr_code_url}

    If you lose this email, you can still be verified with your name or email.
    """

    @classmethod
    def get_qr_invitation_templates(cls) -> tuple[str, str, str]:
        """Returns: (subject, html_body, text_body)"""
        return cls.QR_INVITATION_SUBJECT, cls.QR_INVITATION_HTML, cls.QR_INVITATION_TEXT

    @classmethod
    def render_qr_invitation(
        cls,
        config: "InvitationWording",
        guest_name: str,
        qr_image_data_url: str,
        qr_code_url: str,
    ) -> tuple[str, str, str]:
        """Returns: (subject, html_body, text_body) with guest values filled in."""
        subject, html_template, text_template = cls.get_qr_invitation_templates()

        html_body = html_template.format(
            guest_name=html.escape(guest_name),
            couple_names=html.escape(config.couple_names),
            event_date=html.escape(config.event_date),
            event_location=html.escape(config.event_location),
            qr_image_data_url=qr_image_data_url,
            qr_code_url=html.escape(qr_code_url),
        )
        text_body = text_template.format(
            guest_name=guest_name,
            couple_names=config.couple_names,
            event_date=config.event_date,
            event_location=config.event_location,
            qr_code_url=qr_code_url,
        )
        return subject, html_body, text_body
