"""Core services for the intellectual events finder: store, retrieval, ingestion and client-side filtering."""
