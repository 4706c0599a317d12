"""
Rotas de Produtos e importação de NFe (entrada de estoque)
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File
from sqlalchemy.orm import Session
from app.api.deps import get_db, get_current_tenant_id, get_importacao_service, require_senha_atualizada
from app.api.utils import get_by_id, validate_unique, paginate_query, apply_search_filter
from app.models.produto import Produto, StatusProduto
from app.schemas.nfe import NotaFiscalImportacao, ResultadoImportacaoResponse
from app.schemas.produto import ProdutoCreate, ProdutoResponse, ProdutoListResponse
from app.services.importacao_nfe_service import ImportacaoNFeService
from app.services.nfe_parser import parse_nfe, NFeInvalidaError

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_senha_atualizada)])


@router.post("", response_model=ProdutoResponse, status_code=201)
def criar_produto(
    produto: ProdutoCreate,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Criar novo produto"""
    validate_unique(db, Produto, "codigo", produto.codigo, tenant_id, display_name="Código de produto")

    db_produto = Produto(**produto.model_dump(), tenant_id=tenant_id)
    db.add(db_produto)
    db.commit()
    db.refresh(db_produto)
    return db_produto


@router.get("", response_model=ProdutoListResponse)
def listar_produtos(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    busca: Optional[str] = Query(None, description="Buscar por código, nome ou código de barras"),
    estoque_baixo: bool = Query(False, description="Apenas ativos com estoque no mínimo ou abaixo"),
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Listar produtos com paginação e filtros"""
    query = db.query(Produto).filter(Produto.tenant_id == tenant_id)
    query = apply_search_filter(query, busca, Produto.codigo, Produto.nome, Produto.codigo_barras)

    order_by = Produto.nome
    if estoque_baixo:
        query = query.filter(
            Produto.estoque <= Produto.estoque_minimo,
            Produto.status == StatusProduto.ATIVO
        )
        order_by = (Produto.estoque, Produto.nome)

    items, total = paginate_query(query, page, page_size, order_by)
    return {"items": items, "total": total}


@router.get("/{produto_id}", response_model=ProdutoResponse)
def obter_produto(
    produto_id: int,
    db: Session = Depends(get_db),
    tenant_id: int = Depends(get_current_tenant_id)
):
    """Obter detalhes de um produto específico"""
    return get_by_id(db, Produto, produto_id, tenant_id, error_message="Produto não encontrado")


# ============ IMPORTAÇÃO DE NFe ============

def _ler_nfe(arquivo: UploadFile) -> NotaFiscalImportacao:
    try:
        return parse_nfe(arquivo.file.read())
    except NFeInvalidaError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _aplicar_nota(service: ImportacaoNFeService, tenant_id: int, nota: NotaFiscalImportacao) -> dict:
    resultado = service.processar(tenant_id, nota)
    if not resultado.success:
        raise HTTPException(status_code=503, detail=resultado.mensagem)
    return {
        "fornecedor_id": resultado.fornecedor_id,
        "fornecedor_criado": resultado.fornecedor_criado,
        "produtos_atualizados": resultado.produtos_atualizados,
        "produtos_criados": resultado.produtos_criados,
    }


@router.post("/importar-nfe/preview", response_model=NotaFiscalImportacao)
def preview_nfe(arquivo: UploadFile = File(...)):
    """Lê o XML e devolve fornecedor + itens, sem gravar nada"""
    return _ler_nfe(arquivo)


@router.post("/importar-nfe", response_model=ResultadoImportacaoResponse)
def importar_nfe(
    arquivo: UploadFile = File(...),
    tenant_id: int = Depends(get_current_tenant_id),
    service: ImportacaoNFeService = Depends(get_importacao_service)
):
    """
    Importa o XML da NFe: cadastra o fornecedor se preciso,
    soma as quantidades ao estoque e cadastra produtos novos.
    """
    nota = _ler_nfe(arquivo)
    logger.info("Importando NFe %s (%d itens)", arquivo.filename, len(nota.itens))
    return _aplicar_nota(service, tenant_id, nota)


@router.post("/importar", response_model=ResultadoImportacaoResponse)
def importar_nota(
    nota: NotaFiscalImportacao,
    tenant_id: int = Depends(get_current_tenant_id),
    service: ImportacaoNFeService = Depends(get_importacao_service)
):
    """Importa uma nota já revisada (payload do preview, possivelmente editado)"""
    return _aplicar_nota(service, tenant_id, nota)
