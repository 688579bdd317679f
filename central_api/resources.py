from dataclasses import dataclass
from typing import Tuple, Type

from pydantic import BaseModel

from central_api import schemas


@dataclass(frozen=True)
class Resource:
    name: str
    label: str
    not_found: str
    schema_in: Type[BaseModel]
    schema_out: Type[BaseModel]
    model_label: str
    tag: str
    lookup_field: str = "name"
    unique_fields: Tuple[str, ...] = ()


SUPPLIER = Resource(
    name="supplier",
    label="Fornecedor",
    not_found="Fornecedor não encontrado",
    schema_in=schemas.SupplierIn,
    schema_out=schemas.SupplierOut,
    model_label="suppliers.Supplier",
    tag="Fornecedores",
    lookup_field="supplier_name",
)

PRODUCT = Resource(
    name="product",
    label="Produto",
    not_found="Produto não encontrado",
    schema_in=schemas.ProductIn,
    schema_out=schemas.ProductOut,
    model_label="products.Product",
    tag="Produtos",
)

USER = Resource(
    name="user",
    label="Usuário",
    not_found="Usuário não encontrado",
    schema_in=schemas.UserIn,
    schema_out=schemas.UserOut,
    model_label="users.User",
    tag="Usuários",
    unique_fields=("email", "username"),
)

STORE = Resource(
    name="store",
    label="Loja",
    not_found="Loja não encontrada",
    schema_in=schemas.StoreIn,
    schema_out=schemas.StoreOut,
    model_label="stores.Store",
    tag="Lojas",
    unique_fields=("cnpj",),
)

ORDER = Resource(
    name="order",
    label="Pedido",
    not_found="Pedido não encontrado",
    schema_in=schemas.OrderIn,
    schema_out=schemas.OrderOut,
    model_label="orders.Order",
    tag="Pedidos",
)

CAMPAIGN = Resource(
    name="campaign",
    label="Campanha",
    not_found="Campanha não encontrada",
    schema_in=schemas.CampaignIn,
    schema_out=schemas.CampaignOut,
    model_label="campaigns.Campaign",
    tag="Campanhas",
)

RESOURCES = (SUPPLIER, PRODUCT, USER, STORE, ORDER, CAMPAIGN)
