"""Rotas de webhook Shopify."""
