"""Core: dominio, contratos, configuración, logging y servicios."""
