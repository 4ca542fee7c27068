# Services package init
"""
Formulario Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and MongoDB (persistence).

Service Inventory:
    - SubmissionService: builds, inserts and returns form submissions,
      translating every failure into a FormularioError
"""
