"""Modelos y entidades del dominio.

Por qué:
- Aquí viven el catálogo de objetos Salesforce, los campos calificados y los
  registros hidratados (Pydantic v2).
- El dominio no conoce HTTP, CLI ni SOQL: solo conceptos del problema.
"""
