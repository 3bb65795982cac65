# quote_api/data/catalog.py
# Bundled catalog loaded into an empty database at startup (SEED_CATALOG=true).

PRODUCTS = [
    # FY26
    {"name": "Video Safety Camera", "sku": "VS-CAM-001", "pricebook": "FY26", "product_type": "license",
     "category": "Video Safety", "hardware": 299.00, "per_license_per_month": 15.00,
     "prices": {"CAD": {"hardware": 399.00, "perLicensePerMonth": 20.00},
                "EUR": {"hardware": 279.00, "perLicensePerMonth": 14.00}}},
    {"name": "Fleet Gateway", "sku": "FG-GW-2026", "pricebook": "FY26", "product_type": "license",
     "category": "Gateway", "hardware": 399.00, "per_license_per_month": 25.00,
     "prices": {"CAD": {"hardware": 529.00, "perLicensePerMonth": 33.00}}},
    {"name": "Driver Safety Score", "sku": "DSS-PRO-26", "pricebook": "FY26", "product_type": "license",
     "category": "Safety", "hardware": 0.0, "per_license_per_month": 12.00},
    {"name": "Route Optimization", "sku": "RO-PREMIUM-26", "pricebook": "FY26", "product_type": "license",
     "category": "Routing", "hardware": 0.0, "per_license_per_month": 18.00},
    {"name": "ELD Compliance", "sku": "ELD-COMP-26", "pricebook": "FY26", "product_type": "license",
     "category": "Compliance", "hardware": 199.00, "per_license_per_month": 20.00},
    {"name": "Asset Tracker", "sku": "AT-GPS-26", "pricebook": "FY26", "product_type": "license",
     "category": "Tracking", "hardware": 149.00, "per_license_per_month": 8.00},
    {"name": "Temperature Monitoring", "sku": "TEMP-MON-26", "pricebook": "FY26", "product_type": "license",
     "category": "Monitoring", "hardware": 249.00, "per_license_per_month": 10.00},
    {"name": "Fuel Management", "sku": "FUEL-MGT-26", "pricebook": "FY26", "product_type": "license",
     "category": "Fuel", "hardware": 0.0, "per_license_per_month": 14.00},
    {"name": "Camera Mounting Kit", "sku": "ACC-MNT-26", "pricebook": "FY26", "product_type": "accessory",
     "category": "Accessories", "hardware": 49.00, "per_license_per_month": 0.0},
    {"name": "Harness Extension Cable", "sku": "ACC-CBL-26", "pricebook": "FY26", "product_type": "accessory",
     "category": "Accessories", "hardware": 29.00, "per_license_per_month": 0.0},
    # FY25
    {"name": "Video Safety Camera", "sku": "VS-CAM-001", "pricebook": "FY25", "product_type": "license",
     "category": "Video Safety", "hardware": 279.00, "per_license_per_month": 14.00},
    {"name": "Fleet Gateway", "sku": "FG-GW-2025", "pricebook": "FY25", "product_type": "license",
     "category": "Gateway", "hardware": 349.00, "per_license_per_month": 23.00},
    {"name": "Driver Safety Score", "sku": "DSS-PRO-25", "pricebook": "FY25", "product_type": "license",
     "category": "Safety", "hardware": 0.0, "per_license_per_month": 11.00},
    {"name": "Route Optimization", "sku": "RO-PREMIUM-25", "pricebook": "FY25", "product_type": "license",
     "category": "Routing", "hardware": 0.0, "per_license_per_month": 16.00},
    # Legacy
    {"name": "Video Safety Camera", "sku": "VS-CAM-LEGACY", "pricebook": "Legacy", "product_type": "license",
     "category": "Video Safety", "hardware": 249.00, "per_license_per_month": 12.00},
    {"name": "Fleet Gateway", "sku": "FG-GW-LEGACY", "pricebook": "Legacy", "product_type": "license",
     "category": "Gateway", "hardware": 299.00, "per_license_per_month": 20.00},
    {"name": "ELD Compliance", "sku": "ELD-COMP-LEGACY", "pricebook": "Legacy", "product_type": "license",
     "category": "Compliance", "hardware": 179.00, "per_license_per_month": 18.00},
]

ACCOUNTS = [
    {"id": "acc-001", "name": "Acme Corporation", "industry": "Logistics", "region": "North America",
     "account_type": "Enterprise", "existing_contract_info": "Current customer, 3-year contract"},
    {"id": "acc-002", "name": "Global Transport Solutions", "industry": "Transportation",
     "region": "North America", "account_type": "Enterprise"},
    {"id": "acc-003", "name": "Metro Delivery Services", "industry": "Last Mile Delivery",
     "region": "North America", "account_type": "Mid-Market"},
    {"id": "acc-004", "name": "Pacific Freight Lines", "industry": "Freight", "region": "North America",
     "account_type": "Enterprise", "existing_contract_info": "Prospect, no existing contract"},
    {"id": "acc-005", "name": "City Waste Management", "industry": "Waste Management",
     "region": "North America", "account_type": "Mid-Market"},
    {"id": "acc-006", "name": "Regional Food Distributors", "industry": "Food & Beverage",
     "region": "North America", "account_type": "Mid-Market"},
    {"id": "acc-007", "name": "National Construction Co.", "industry": "Construction",
     "region": "North America", "account_type": "Enterprise"},
    {"id": "acc-008", "name": "Express Courier Network", "industry": "Courier",
     "region": "North America", "account_type": "Mid-Market"},
]
