"""
Senetic to Shopify Catalogue Sync

Modules:
    models        - Data models (feed records, product draft, run summary)
    common        - Shared utilities (settings, config loader, logging, pacing, errors)
    content       - Product description cleanup and image extraction
    images        - Image host policy, filenames, Cloudinary relay, uploads
    senetic       - Senetic B2B feed client
    shopify       - Shopify Admin API client and product operations
    sync          - Reconciliation engine and import orchestrator
    notifications - Import webhook events
    web           - Flask HTTP surface
"""
