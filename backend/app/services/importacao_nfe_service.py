"""
Servico de importacao de NFe (reconciliacao de estoque)

Para cada nota:
1. Garante o fornecedor pelo CNPJ (cria na primeira nota)
2. Para cada item, procura o produto pelo nome (sem diferenciar
   maiusculas) e depois pelo codigo
   - encontrado: soma a quantidade ao estoque e grava o novo custo
   - nao encontrado: cadastra o produto com markup padrao

A nota inteira e aplicada numa unica transacao, sob o lock do tenant.
Se algo falhar no meio, nada e gravado.
"""
import logging
import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.tenant_locks import tenant_lock
from app.models.fornecedor import Fornecedor
from app.models.produto import Produto, UnidadeMedida, StatusProduto
from app.repositories import FornecedorRepository, ProdutoRepository
from app.repositories.produto_repository import normalizar_nome
from app.schemas.nfe import NotaFiscalImportacao, ItemNotaFiscal

logger = logging.getLogger(__name__)

DESCRICAO_IMPORTACAO = "Importado de NFe"
CENTAVOS = Decimal("0.01")


@dataclass
class ResultadoImportacao:
    success: bool
    fornecedor_id: Optional[int] = None
    fornecedor_criado: bool = False
    produtos_atualizados: int = 0
    produtos_criados: int = 0
    erro: Optional[str] = None
    mensagem: Optional[str] = None


def calcular_preco_venda(preco_custo: Decimal) -> Decimal:
    """Preco de venda sugerido para produto novo (custo x markup padrao)"""
    return (preco_custo * settings.MARKUP_PADRAO).quantize(CENTAVOS)


def unidade_do_item(unidade: str) -> UnidadeMedida:
    """uCom da nota quando for uma unidade conhecida, senao UN"""
    try:
        return UnidadeMedida(unidade.strip().upper())
    except ValueError:
        return UnidadeMedida.UN


class ImportacaoNFeService:
    """Aplica notas fiscais de entrada ao estoque do tenant"""

    def __init__(
        self,
        db: Session,
        produtos: Optional[ProdutoRepository] = None,
        fornecedores: Optional[FornecedorRepository] = None
    ):
        self.db = db
        self.produtos = produtos or ProdutoRepository(db)
        self.fornecedores = fornecedores or FornecedorRepository(db)

    def processar(self, tenant_id: int, nota: NotaFiscalImportacao) -> ResultadoImportacao:
        """
        Importa a nota para o tenant.

        Returns:
            ResultadoImportacao com os contadores aplicados, ou
            erro BANCO_INDISPONIVEL (nesse caso nada foi gravado)
        """
        resultado = ResultadoImportacao(success=True)

        try:
            with tenant_lock(tenant_id):
                fornecedor, criado = self._garantir_fornecedor(tenant_id, nota)
                resultado.fornecedor_id = fornecedor.id
                resultado.fornecedor_criado = criado

                indice_nomes = self.produtos.indice_por_nome(tenant_id)
                for item in nota.itens:
                    produto_id = self._localizar_produto(tenant_id, item, indice_nomes)
                    if produto_id is not None:
                        self.produtos.registrar_entrada(produto_id, item.quantidade, item.preco_unitario)
                        resultado.produtos_atualizados += 1
                    else:
                        novo = self._criar_produto(tenant_id, item)
                        indice_nomes.setdefault(normalizar_nome(novo.nome), novo.id)
                        resultado.produtos_criados += 1

                self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro de banco na importação de NFe (fornecedor %s)", nota.fornecedor.documento)
            return ResultadoImportacao(
                success=False,
                erro="BANCO_INDISPONIVEL",
                mensagem="Banco de dados indisponível. Nenhum item da nota foi importado."
            )

        logger.info(
            "NFe importada: fornecedor=%s criado=%s atualizados=%d criados=%d",
            nota.fornecedor.documento, resultado.fornecedor_criado,
            resultado.produtos_atualizados, resultado.produtos_criados
        )
        return resultado

    def _garantir_fornecedor(self, tenant_id: int, nota: NotaFiscalImportacao) -> tuple:
        fornecedor = self.fornecedores.buscar_por_documento(tenant_id, nota.fornecedor.documento, for_update=True)
        if fornecedor:
            return fornecedor, False

        fornecedor = self.fornecedores.adicionar(Fornecedor(
            tenant_id=tenant_id,
            nome=nota.fornecedor.nome,
            documento=nota.fornecedor.documento,
        ))
        logger.info("Fornecedor criado pela NFe: %s", fornecedor.documento)
        return fornecedor, True

    def _localizar_produto(self, tenant_id: int, item: ItemNotaFiscal, indice_nomes: Dict[str, int]) -> Optional[int]:
        # Nome tem precedencia sobre codigo; codigo vazio nunca casa
        produto_id = indice_nomes.get(normalizar_nome(item.nome))
        if produto_id is None and item.codigo:
            produto_id = self.produtos.buscar_id_por_codigo(tenant_id, item.codigo)
        return produto_id

    def _criar_produto(self, tenant_id: int, item: ItemNotaFiscal) -> Produto:
        return self.produtos.adicionar(Produto(
            tenant_id=tenant_id,
            codigo=item.codigo or self._gerar_codigo(tenant_id),
            codigo_barras=None,
            nome=item.nome,
            descricao=DESCRICAO_IMPORTACAO,
            categoria=settings.CATEGORIA_PADRAO_IMPORTACAO,
            unidade=unidade_do_item(item.unidade),
            preco_custo=item.preco_unitario,
            preco_venda=calcular_preco_venda(item.preco_unitario),
            estoque=item.quantidade,
            estoque_minimo=Decimal(settings.ESTOQUE_MINIMO_PADRAO),
            status=StatusProduto.ATIVO,
        ))

    def _gerar_codigo(self, tenant_id: int) -> str:
        """Codigo PROD<n> livre no tenant, para itens sem cProd"""
        while True:
            codigo = f"PROD{random.randint(0, 99999):05d}"
            if not self.produtos.codigo_existe(tenant_id, codigo):
                return codigo
