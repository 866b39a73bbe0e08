"""Domain services: authentication, principals, customers and invoices."""
