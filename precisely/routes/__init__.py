# Routes package init
"""
Precisely Documents: HTTP Routes Package
=========================================

Route Inventory:
    - documents.py:  POST   /documents         (create)
                     GET    /documents         (list all)
                     GET    /documents/{id}    (read one)
                     PUT    /documents/{id}    (update)
                     DELETE /documents/{id}    (delete)
    - health.py:     GET    /health            (liveness + database probe)

Routes stay thin: decode the request, call the service, wrap the result in
the envelope. Failures are raised and left to the handlers registered in
`precisely.main`.
"""
