# Routes package init
"""
Pokedex Backend — API Routes Package
======================================

Route Inventory:
    - health.py:   GET  /                       (liveness text)
                   GET  /health                 (database check)
    - pokemons.py: GET  /pokemons               (list all)
                   GET  /pokemons/search/{name} (first name match)
                   GET  /pokemons/{id}          (one record)
                   POST /pokemons               (create)
                   PUT  /pokemon/{id}           (replace)
                   DELETE /pokemon/{id}         (delete)
    - upload.py:   POST /upload/pokemon/{id}    (base64 image upload)

Routes stay thin: extract request data, call a service, return its result.
"""
