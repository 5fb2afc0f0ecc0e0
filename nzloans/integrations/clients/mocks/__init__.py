"""
Mock integration clients.

These clients return realistic data without calling any external service.
They are used when:
- Running the site helpers locally against the bundled data/products.json
- Testing catalogue and click tracking behaviour without network access

Important:
- Mock clients must follow the SAME interface as real HTTP clients.

Switching to real:
Set CATALOGUE_MODE=http (with CATALOGUE_BASE_URL) to use the HTTP catalogue client.
The Google Analytics reporter is wired only when analytics.enabled is true in
config/app_config.yml and both GA_MEASUREMENT_ID and GA_API_SECRET are set.
nzloans/app.py makes both choices.
"""
