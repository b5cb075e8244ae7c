"""Capa HTTP de la API del censo.

English: HTTP layer of the census API.
"""
