"""
Static seed data served when no database is configured.

Same shape as the live `customers`, `invoices` and `revenue` tables.
Customers are kept sorted by name. Invoices have no `id` column; the
fallback store derives positional ids from list order. Amounts are cents.
"""

customers = [
    {
        "id": "CC27C14A-0ACF-4F4A-A6C9-D45682C144B9",
        "name": "Amy Burns",
        "email": "amy@burns.com",
        "image_url": "/customers/amy-burns.png",
    },
    {
        "id": "13D07535-C59E-4157-A011-F8D2EF4E0CBB",
        "name": "Balazs Orban",
        "email": "balazs@orban.com",
        "image_url": "/customers/balazs-orban.png",
    },
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "76d65c26-f784-44a2-ac19-586678f7c2f2",
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
]

_AMY, _BALAZS, _DELBA, _EVIL, _LEE, _MICHAEL = (c["id"] for c in customers)

invoices = [
    {"customer_id": _EVIL, "amount": 15795, "status": "pending", "date": "2022-12-06"},
    {"customer_id": _DELBA, "amount": 20348, "status": "pending", "date": "2022-11-14"},
    {"customer_id": _AMY, "amount": 3040, "status": "paid", "date": "2022-10-29"},
    {"customer_id": _MICHAEL, "amount": 44800, "status": "paid", "date": "2023-09-10"},
    {"customer_id": _BALAZS, "amount": 34577, "status": "pending", "date": "2023-08-05"},
    {"customer_id": _LEE, "amount": 54246, "status": "pending", "date": "2023-07-16"},
    {"customer_id": _EVIL, "amount": 666, "status": "pending", "date": "2023-06-27"},
    {"customer_id": _MICHAEL, "amount": 32545, "status": "paid", "date": "2023-06-09"},
    {"customer_id": _AMY, "amount": 1250, "status": "paid", "date": "2023-06-17"},
    {"customer_id": _BALAZS, "amount": 8546, "status": "paid", "date": "2023-06-07"},
    {"customer_id": _DELBA, "amount": 500, "status": "paid", "date": "2023-08-19"},
    {"customer_id": _BALAZS, "amount": 8945, "status": "paid", "date": "2023-06-03"},
    {"customer_id": _LEE, "amount": 1000, "status": "paid", "date": "2022-06-05"},
]

revenue = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 2200},
    {"month": "Apr", "revenue": 2500},
    {"month": "May", "revenue": 2300},
    {"month": "Jun", "revenue": 3200},
    {"month": "Jul", "revenue": 3500},
    {"month": "Aug", "revenue": 3700},
    {"month": "Sep", "revenue": 2500},
    {"month": "Oct", "revenue": 2800},
    {"month": "Nov", "revenue": 3000},
    {"month": "Dec", "revenue": 4800},
]
