# Routes package init
"""
Formulario Backend — API Routes Package
=========================================

Route Inventory:
    - form.py:  POST /api/form   (store one form submission)

Routes stay thin: they extract the body, call the service and shape the
response. Everything else answers with the framework's default 404/405.
"""
