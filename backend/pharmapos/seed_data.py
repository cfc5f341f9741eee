# Overview: Static fixtures the in-memory catalog and user directory start from.

SEED_USERS = [
    {"id": "u-admin", "name": "Ayesha Khan", "email": "admin@epos.com", "role": "admin"},
    {"id": "u-pharm", "name": "Dr. Bilal Ahmed", "email": "pharm@epos.com", "role": "pharmacist"},
    {"id": "u-cash", "name": "Usman Ali", "email": "cash@epos.com", "role": "cashier"},
]

SEED_PRODUCTS = [
    {
        "id": 1, "name": "Panadol", "generic_name": "Paracetamol", "strength": "500mg",
        "form": "Tablet", "category": "Pain Relief", "price": "30", "cost_price": "22",
        "stock": 240, "expiry_date": "2027-12-31", "barcode": "8964000010011",
        "sku": "PAN-500", "batch_number": "PN2311", "supplier": "GSK",
        "pack_size": "Strip of 10", "reorder_level": 50, "location": "A1",
    },
    {
        "id": 2, "name": "Augmentin", "generic_name": "Amoxicillin + Clavulanic Acid",
        "strength": "625mg", "form": "Tablet", "category": "Antibiotics", "price": "520",
        "cost_price": "430", "stock": 35, "expiry_date": "2027-06-30",
        "barcode": "8964000020028", "sku": "AUG-625", "batch_number": "AG0924",
        "supplier": "GSK", "pack_size": "Box of 6", "reorder_level": 10, "location": "B2",
        "requires_prescription": True,
    },
    {
        "id": 3, "name": "Brufen", "generic_name": "Ibuprofen", "strength": "400mg",
        "form": "Tablet", "category": "Pain Relief", "price": "65", "cost_price": "48",
        "stock": 4, "expiry_date": "2027-03-31", "barcode": "8964000030035",
        "sku": "BRU-400", "batch_number": "BR1123", "supplier": "Abbott",
        "pack_size": "Strip of 10", "reorder_level": 0, "location": "A2",
        "warning_note": "Take after meals. Not for patients with gastric ulcers.",
    },
    {
        "id": 4, "name": "Rivotril", "generic_name": "Clonazepam", "strength": "2mg",
        "form": "Tablet", "category": "Neurology", "price": "180", "cost_price": "140",
        "stock": 20, "expiry_date": "2027-09-30", "barcode": "8964000040042",
        "sku": "RIV-2", "batch_number": "RV0724", "supplier": "Roche",
        "pack_size": "Strip of 10", "reorder_level": 5, "location": "Locked Cabinet",
        "requires_prescription": True, "is_narcotic": True,
        "warning_note": "Controlled drug. Record CNIC of buyer.",
    },
    {
        "id": 5, "name": "Hydryllin", "generic_name": "Diphenhydramine + Ammonium Chloride",
        "strength": "120ml", "form": "Syrup", "category": "Cough & Cold", "price": "110",
        "cost_price": "85", "stock": 60, "expiry_date": "2026-12-15",
        "barcode": "8964000050059", "sku": "HYD-120", "batch_number": "HY0525",
        "supplier": "Searle", "pack_size": "Bottle", "reorder_level": 12, "location": "C1",
    },
    {
        "id": 6, "name": "Polyfax", "generic_name": "Polymyxin B + Bacitracin",
        "strength": "20g", "form": "Ointment", "category": "First Aid", "price": "240",
        "cost_price": "190", "stock": 0, "expiry_date": "2027-01-31",
        "barcode": "8964000060066", "sku": "POL-20", "batch_number": "PF0124",
        "supplier": "GSK", "pack_size": "Tube", "reorder_level": 6, "location": "D3",
    },
    {
        "id": 7, "name": "Surbex Z", "generic_name": "Multivitamin + Zinc", "strength": "",
        "form": "Tablet", "category": "Vitamins", "price": "420", "cost_price": "330",
        "stock": 25, "expiry_date": "2024-08-31", "barcode": "8964000070073",
        "sku": "SBZ-30", "batch_number": "SZ0822", "supplier": "Abbott",
        "pack_size": "Bottle of 30", "reorder_level": 8, "location": "E1",
    },
    {
        "id": 8, "name": "Digital Thermometer", "generic_name": "Thermometer", "strength": "",
        "form": "Equipment", "category": "Devices", "price": "650", "cost_price": "480",
        "stock": 12, "expiry_date": "2030-12-31", "barcode": "8964000080080",
        "sku": "THERM-01", "batch_number": "TH2024", "supplier": "Omron",
        "pack_size": "Unit", "reorder_level": 3, "location": "F1",
    },
]
