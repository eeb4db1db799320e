# app/endpoints/catalog_endpoints.py
"""
One CRUD router per resource, all built by ``build_resource_router``.

Routes (shown for suppliers; every resource follows the same pattern):

    GET    /suppliers                      list (filters, sort, pagination)
    GET    /suppliers/search?term=         substring search, max 20
    GET    /suppliers/supplierID/{id}      lookup by domain ID (SP-xxxxx)
    GET    /suppliers/{supplier_Id}        lookup by internal id
    POST   /suppliers                      create
    PUT    /suppliers/{supplier_Id}        partial update
    DELETE /suppliers/{supplier_Id}        delete one
    DELETE /suppliers                      delete all
"""
from app.endpoints.resource_router import build_resource_router
from app.models.customer import CUSTOMER_RESOURCE, CustomerCreate, CustomerQuery, CustomerUpdate
from app.models.inventory import INVENTORY_RESOURCE, InventoryCreate, InventoryQuery, InventoryUpdate
from app.models.order import ORDER_RESOURCE, OrderCreate, OrderQuery, OrderUpdate
from app.models.product import PRODUCT_RESOURCE, ProductCreate, ProductQuery, ProductUpdate
from app.models.purchase import PURCHASE_RESOURCE, PurchaseCreate, PurchaseQuery, PurchaseUpdate
from app.models.supplier import SUPPLIER_RESOURCE, SupplierCreate, SupplierQuery, SupplierUpdate
from app.models.transfer import TRANSFER_RESOURCE, TransferCreate, TransferQuery, TransferUpdate
from app.models.user import USER_RESOURCE, UserCreate, UserQuery, UserUpdate
from app.models.warehouse import WAREHOUSE_RESOURCE, WarehouseCreate, WarehouseQuery, WarehouseUpdate

supplier_router = build_resource_router(SUPPLIER_RESOURCE, SupplierCreate, SupplierUpdate, SupplierQuery)
product_router = build_resource_router(PRODUCT_RESOURCE, ProductCreate, ProductUpdate, ProductQuery)
customer_router = build_resource_router(CUSTOMER_RESOURCE, CustomerCreate, CustomerUpdate, CustomerQuery)
warehouse_router = build_resource_router(WAREHOUSE_RESOURCE, WarehouseCreate, WarehouseUpdate, WarehouseQuery)
inventory_router = build_resource_router(INVENTORY_RESOURCE, InventoryCreate, InventoryUpdate, InventoryQuery)
order_router = build_resource_router(ORDER_RESOURCE, OrderCreate, OrderUpdate, OrderQuery)
purchase_router = build_resource_router(PURCHASE_RESOURCE, PurchaseCreate, PurchaseUpdate, PurchaseQuery)
transfer_router = build_resource_router(TRANSFER_RESOURCE, TransferCreate, TransferUpdate, TransferQuery)
user_router = build_resource_router(USER_RESOURCE, UserCreate, UserUpdate, UserQuery)

routers = [
    supplier_router, product_router, customer_router, warehouse_router, inventory_router,
    order_router, purchase_router, transfer_router, user_router,
]
