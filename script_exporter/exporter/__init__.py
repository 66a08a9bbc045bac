"""HTTP exposition — FastAPI app serving probe results in Prometheus format."""
