"""Business services: persistence gateway, invoice arithmetic, documents."""
