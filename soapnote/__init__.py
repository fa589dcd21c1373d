"""SoapNote - pediatric OT SOAP note composer with CPT billing-time reconciliation."""

__version__ = "0.1.0"
