"""ERP Dashboard package.

Organized by feature modules (masters, hr, inventory, production, sales,
reports, users, settings) with a thin Flask controller layer on top of
service/repository layers. Most screens are generic CRUD resources.
"""
