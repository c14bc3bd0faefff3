"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del backend que consulta las cuentas.
- El cascade y el finder dependen de la abstracción, no del cliente HTTP.
"""
