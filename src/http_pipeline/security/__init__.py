"""Client certificate inspection and request sanitization."""

from http_pipeline.security.certificates import get_cn_from_x509_certificate, load_pem_certificate
from http_pipeline.security.sanitizer import sanitize_client_cert

__all__ = [
    "get_cn_from_x509_certificate",
    "load_pem_certificate",
    "sanitize_client_cert",
]
