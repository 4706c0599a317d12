from decimal import Decimal
from typing import Optional, Dict
from sqlalchemy import update
from sqlalchemy.orm import Session
from app.models.produto import Produto


def normalizar_nome(nome: str) -> str:
    """
    Chave de comparação de nomes (sem diferenciar maiúsculas, inclusive acentuadas)

    Espaços nas pontas são descartados: o xProd de vários emissores vem
    preenchido com brancos. Espaços internos continuam contando.
    """
    return nome.strip().casefold()


class ProdutoRepository:
    """
    Acesso aos produtos de um tenant

    Escritas de estoque são feitas por linha (UPDATE ... SET estoque = estoque + q),
    nunca regravando a coleção inteira.
    """

    def __init__(self, db: Session):
        self.db = db

    def indice_por_nome(self, tenant_id: int) -> Dict[str, int]:
        """
        Mapa nome normalizado -> id do produto

        Em nomes repetidos vence o produto mais antigo (menor id).
        A comparação é feita em Python porque o lower() do SQLite
        não trata letras acentuadas.
        """
        linhas = self.db.query(Produto.id, Produto.nome).filter(
            Produto.tenant_id == tenant_id
        ).order_by(Produto.id).with_for_update().all()

        indice: Dict[str, int] = {}
        for produto_id, nome in linhas:
            indice.setdefault(normalizar_nome(nome), produto_id)
        return indice

    def buscar_id_por_codigo(self, tenant_id: int, codigo: str) -> Optional[int]:
        linha = self.db.query(Produto.id).filter(
            Produto.tenant_id == tenant_id,
            Produto.codigo == codigo
        ).first()
        return linha[0] if linha else None

    def codigo_existe(self, tenant_id: int, codigo: str) -> bool:
        return self.buscar_id_por_codigo(tenant_id, codigo) is not None

    def adicionar(self, produto: Produto) -> Produto:
        self.db.add(produto)
        self.db.flush()  # Visível para os próximos itens da mesma nota
        return produto

    def registrar_entrada(self, produto_id: int, quantidade: Decimal, preco_custo: Decimal) -> None:
        """
        Entrada de estoque vinda de nota fiscal:
        soma a quantidade e sobrescreve o custo com o último preço
        """
        self.db.execute(
            update(Produto)
            .where(Produto.id == produto_id)
            .values(estoque=Produto.estoque + quantidade, preco_custo=preco_custo)
            .execution_options(synchronize_session=False)
        )
