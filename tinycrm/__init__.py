"""Tiny CRM: companies, products, remit information and invoices over REST."""
