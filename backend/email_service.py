"""
Service d'emails SendGrid pour le CRM
- Code de vérification à l'inscription
- Lien de réinitialisation du mot de passe
- Emails libres envoyés aux contacts
"""

import base64
import logging
from html import escape

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import (
    Mail, Email, To, Content, Attachment, FileContent, FileName, FileType, Disposition,
)

from config import SENDGRID_API_KEY, SENDER_EMAIL, FRONTEND_URL

logger = logging.getLogger("email_service")

BASE_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0; background-color: #f9f9f9; }
    .email-container { max-width: 600px; margin: 20px auto; padding: 25px; background-color: #ffffff; border: 1px solid #ddd; border-radius: 8px; }
    .alert { background-color: #e6f2ff; color: #0056b3; padding: 12px; border-radius: 5px; text-align: center; font-weight: bold; margin-bottom: 15px; }
    .code { font-size: 28px; letter-spacing: 6px; text-align: center; font-weight: bold; }
    .footer { margin-top: 20px; font-size: 13px; color: #777; }
"""


def _wrap(title: str, body: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html>
    <head><style>{BASE_STYLE}</style></head>
    <body>
        <div class="email-container">
            <div class="alert">{title}</div>
            {body}
            <div class="footer">
                <p>Best regards,<br><strong>The CRM Team</strong></p>
            </div>
        </div>
    </body>
    </html>
    """


class EmailService:
    """Service centralisé pour l'envoi d'emails"""

    def __init__(self):
        self.api_key = SENDGRID_API_KEY
        self.sender = SENDER_EMAIL

    def _send_email(self, to_email: str, subject: str, html_content: str, attachments=None) -> bool:
        """
        Envoie un email via SendGrid
        attachments: liste de (nom, contenu bytes, type MIME)
        """
        if not self.api_key:
            logger.error("SENDGRID_API_KEY non configurée")
            return False

        try:
            message = Mail(
                from_email=Email(self.sender, "CRM"),
                to_emails=To(to_email),
                subject=subject,
                html_content=Content("text/html", html_content)
            )
            for name, content, mime_type in attachments or []:
                message.add_attachment(Attachment(
                    FileContent(base64.b64encode(content).decode()),
                    FileName(name),
                    FileType(mime_type),
                    Disposition("attachment"),
                ))

            sg = SendGridAPIClient(self.api_key)
            response = sg.send(message)

            if response.status_code in [200, 202]:
                logger.info(f"Email sent to {to_email}: {subject}")
                return True
            logger.error(f"Email send failed: {response.status_code}")
            return False

        except Exception as e:
            logger.error(f"Email send exception: {str(e)}")
            return False

    def send_verification_code(self, to_email: str, name: str, code: str) -> bool:
        body = f"""
            <h4>Hello {escape(name)},</h4>
            <p>Use the code below to verify your CRM account. It expires in 1 hour.</p>
            <p class="code">{code}</p>
        """
        return self._send_email(to_email, "Verify your email", _wrap("Email Verification", body))

    def send_password_reset(self, to_email: str, name: str, token: str) -> bool:
        link = f"{FRONTEND_URL}/Resetpassword/{token}"
        body = f"""
            <h4>Hello {escape(name)},</h4>
            <p>We received a request to reset your password. This link expires in 1 hour.</p>
            <p><a href="{link}">Reset Password</a></p>
            <p>If you didn't request this, ignore this email.</p>
        """
        return self._send_email(to_email, "Reset Password", _wrap("Password Reset Request", body))

    def send_contact_email(self, to_email: str, customer_name: str, subject: str, message: str,
                           attachments=None) -> bool:
        body = f"""
            <p>Dear {escape(customer_name)},</p>
            <p>{escape(message)}</p>
        """
        return self._send_email(to_email, subject, _wrap(escape(subject), body), attachments)


email_service = EmailService()
