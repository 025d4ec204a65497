"""Well-known header names."""

FROM = "From"
TO = "To"
DATE = "Date"
SUBJECT = "Subject"

CONTENT_TYPE = "Content-Type"
CONTENT_DISPOSITION = "Content-Disposition"
CONTENT_ID = "Content-ID"
CONTENT_TRANSFER_ENCODING = "Content-Transfer-Encoding"

MIME_VERSION = "MIME-Version"
