"""Clock services.

Services contain all quote selection logic and are called by routes.
Services are deterministic where possible and accept dependencies explicitly
(the random source is injectable).
"""
