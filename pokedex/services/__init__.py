# Services package init
"""
Pokedex Backend — Services Layer
==================================

What:  Business logic between the routes (HTTP) and storage (database, disk).
How:   Services take validated inputs and a session where needed, and raise
       exceptions from pokedex.exceptions; routes map nothing themselves.

Service Inventory:
    - ImageService:   base64 / data URL decoding and image storage
    - PokemonService: list, search, get, create, replace and delete records
"""
