"""Adaptadores de I/O: cliente HTTP del backend y canales de notificación."""
