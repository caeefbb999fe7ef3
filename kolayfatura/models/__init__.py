# Tum modelleri buradan import ediyoruz
# Boylece Alembic autogenerate tum tablolari gorebilir
from kolayfatura.models.user import User
from kolayfatura.models.client import Client
from kolayfatura.models.invoice import Invoice, InvoiceItem

__all__ = ["User", "Client", "Invoice", "InvoiceItem"]
