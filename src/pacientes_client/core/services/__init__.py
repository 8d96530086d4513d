"""Servicios del Core: fachadas de operaciones de dominio."""
