"""
Email gonderme servisi.
SMTP kullanarak fatura bildirimini (ve varsa PDF ekini) gonderir.
Gonder-ve-unut: teslim onayi beklenmez, hata cagirana firlatilmaz.
"""

import logging
import smtplib
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from kolayfatura.config import settings

logger = logging.getLogger(__name__)


def is_email_configured() -> bool:
    """SMTP ayarlari tanimli mi kontrol et."""
    return bool(settings.SMTP_HOST and settings.SMTP_USER and settings.SMTP_PASSWORD)


def compose_invoice_email(invoice, issuer) -> tuple[str, str]:
    """Fatura email'inin konu ve govdesini olustur."""
    client = invoice.client
    client_name = client["name"] if isinstance(client, dict) else client.name
    sender_name = (
        getattr(issuer, "display_name", None)
        or getattr(issuer, "business_name", None)
        or settings.APP_NAME
    )

    subject = f"Invoice #{invoice.invoice_number}"
    body = f"""Dear {client_name},

Please find attached invoice #{invoice.invoice_number} for the amount of {settings.CURRENCY_SYMBOL}{invoice.total:,.2f}.

Due Date: {invoice.due_date:%B %d, %Y}

Thank you for your business!

Best regards,
{sender_name}"""
    return subject, body


def send_email(
    recipient: str,
    subject: str,
    body: str,
    pdf_bytes: bytes | None = None,
    filename: str = "invoice.pdf",
) -> bool:
    """
    Email gonder.
    Basarili ise True, SMTP ayarli degilse veya hata olursa False dondurur.
    """
    if not is_email_configured():
        logger.info("SMTP ayarli degil, email gonderilmedi: %s", recipient)
        return False

    msg = MIMEMultipart()
    msg["From"] = settings.SMTP_FROM_EMAIL or settings.SMTP_USER
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.attach(MIMEText(body, "plain", "utf-8"))

    if pdf_bytes:
        pdf_attachment = MIMEApplication(pdf_bytes, _subtype="pdf")
        pdf_attachment.add_header(
            "Content-Disposition", "attachment", filename=filename
        )
        msg.attach(pdf_attachment)

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
            server.starttls()
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            server.send_message(msg)
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Email gonderilemedi (%s): %s", recipient, e)
        return False
