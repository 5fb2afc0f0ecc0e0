"""
Real HTTP integration clients.

These clients communicate with real external systems via HTTP:
- The site's static catalogue (data/products.json served next to the pages)
- Google Analytics Measurement Protocol

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to nzloans/integrations/contracts/*
"""
