"""HTTP API for SoapNote."""
