# Repositórios por entidade - injetados nos serviços
from app.repositories.tenant_repository import TenantRepository
from app.repositories.funcionario_repository import FuncionarioRepository
from app.repositories.produto_repository import ProdutoRepository
from app.repositories.fornecedor_repository import FornecedorRepository
from app.repositories.venda_repository import VendaRepository

__all__ = [
    "TenantRepository",
    "FuncionarioRepository",
    "ProdutoRepository",
    "FornecedorRepository",
    "VendaRepository",
]
