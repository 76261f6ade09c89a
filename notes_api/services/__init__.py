# Services package init
"""
Notes API — Services Layer
===========================

What:  Business logic and outbound clients, sitting between the routes and
       the data access layer.

Service Inventory:
    - NoteService: note lifecycle and the forward-to-content-service workflow
    - ExternalServiceClient: shared plumbing for outbound HTTP clients
    - TokenValidator: bearer token validation against the login service
    - ContentUploader: multipart uploads to the content service
"""
