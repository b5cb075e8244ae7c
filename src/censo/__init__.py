"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/censo/__init__.py`.
API de consulta del Censo Liberal: resuelve un número de identidad contra un
archivo Parquet descargado bajo demanda desde R2.

Componentes detectados:
  - (sin componentes de nivel de módulo / no top-level components)

======================== ENGLISH ========================
File: `src/censo/__init__.py`.
Censo Liberal lookup API: resolves an identity number against a Parquet file
downloaded on demand from R2.

Detected components:
  - (sin componentes de nivel de módulo / no top-level components)
"""

__version__ = "0.2.0"
