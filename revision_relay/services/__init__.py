# Services package init
"""
Revision Relay — Services Layer
================================

What:  Relays, providers and their supporting pieces.

Service Inventory:
    - prompt_builder:    Fidelity modes, defaults and the prompt template
    - GenerationProvider (llm_base, abstract) / GeminiService
    - StorageProvider (storage_base, abstract) / S3StorageService
    - credentials:       CredentialLoader implementations for the object store
    - GenerationRelay:   prompt → provider → typed outcome
    - UploadRelay:       file → storage → typed outcome
"""
