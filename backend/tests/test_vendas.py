from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from app.models import Produto, Venda
from app.repositories import VendaRepository
from app.schemas.nfe import NotaFiscalImportacao
from app.schemas.venda import VendaCreate
from app.services.importacao_nfe_service import ImportacaoNFeService
from app.services.venda_service import VendaService, ErroVenda

API = "/api/v1"


def venda(*itens, desconto="0", forma_pagamento="PIX"):
    return VendaCreate(
        itens=[{"produto_id": produto_id, "quantidade": qtd} for produto_id, qtd in itens],
        desconto=desconto,
        forma_pagamento=forma_pagamento,
    )


def produto_demo(db, codigo="PROD001"):
    db.expire_all()
    return db.query(Produto).filter(Produto.codigo == codigo).one()


class VendaRepositoryQuebrado(VendaRepository):
    def registrar_saida(self, produto_id, quantidade):
        raise OperationalError("UPDATE", {}, Exception("disco cheio"))


def test_venda_baixa_estoque_e_usa_preco_de_venda(db, loja_demo):
    refri = produto_demo(db)

    resultado = VendaService(db).registrar(loja_demo.id, venda((refri.id, "3"), desconto="2.00"))

    assert resultado.success
    assert resultado.venda.total == Decimal("27.00")
    assert resultado.venda.valor_final == Decimal("25.00")
    [item] = resultado.venda.itens
    assert item.nome_produto == "Refrigerante Cola 2L"
    assert item.preco_unitario == Decimal("9.00")
    assert produto_demo(db).estoque == Decimal("147")


def test_venda_e_importacao_no_mesmo_produto_sao_ambas_aplicadas(db, loja_demo):
    refri = produto_demo(db)

    VendaService(db).registrar(loja_demo.id, venda((refri.id, "3")))
    ImportacaoNFeService(db).processar(loja_demo.id, NotaFiscalImportacao(
        fornecedor={"nome": "Dist X", "documento": "11111111000111"},
        itens=[{"nome": "Refrigerante Cola 2L", "quantidade": "24", "preco_unitario": "5.80"}],
    ))
    VendaService(db).registrar(loja_demo.id, venda((refri.id, "1")))

    assert produto_demo(db).estoque == Decimal("150") - 3 + 24 - 1


def test_estoque_pode_ficar_negativo(db, criar_tenant, criar_produto):
    tenant = criar_tenant()
    produto = criar_produto(tenant, "Pão Francês", "P01", estoque="1")

    resultado = VendaService(db).registrar(tenant.id, venda((produto.id, "4")))

    assert resultado.success
    db.expire_all()
    assert db.get(Produto, produto.id).estoque == Decimal("-3")


def test_produto_de_outra_loja_nao_e_vendido(db, criar_tenant, criar_produto):
    loja_a = criar_tenant("a@teste.com")
    loja_b = criar_tenant("b@teste.com")
    produto_b = criar_produto(loja_b, "Vela", "V1", estoque="7")

    resultado = VendaService(db).registrar(loja_a.id, venda((produto_b.id, "1")))

    assert resultado.erro == ErroVenda.PRODUTO_NAO_ENCONTRADO
    db.expire_all()
    assert db.get(Produto, produto_b.id).estoque == Decimal("7")
    assert db.query(Venda).count() == 0


def test_desconto_maior_que_total_recusado(db, loja_demo):
    refri = produto_demo(db)

    resultado = VendaService(db).registrar(loja_demo.id, venda((refri.id, "1"), desconto="9.01"))

    assert resultado.erro == ErroVenda.DESCONTO_INVALIDO
    assert produto_demo(db).estoque == Decimal("150")


def test_falha_na_baixa_desfaz_a_venda(db, loja_demo):
    refri = produto_demo(db)
    service = VendaService(db, vendas=VendaRepositoryQuebrado(db))

    resultado = service.registrar(loja_demo.id, venda((refri.id, "2")))

    assert resultado.erro == ErroVenda.BANCO_INDISPONIVEL
    assert db.query(Venda).count() == 0
    assert produto_demo(db).estoque == Decimal("150")


@pytest.mark.parametrize("itens", [[], [{"produto_id": 1, "quantidade": 0}]])
def test_venda_sem_itens_ou_com_quantidade_zero_rejeitada(itens):
    with pytest.raises(ValidationError):
        VendaCreate(itens=itens, forma_pagamento="DINHEIRO")


def test_resumo_de_vendas(db, loja_demo):
    refri = produto_demo(db)
    arroz = produto_demo(db, "PROD002")
    service = VendaService(db)
    service.registrar(loja_demo.id, venda((refri.id, "2"), (arroz.id, "1")))
    service.registrar(loja_demo.id, venda((refri.id, "1")))

    resumo = service.resumo(loja_demo.id)

    assert resumo["quantidade_vendas"] == 2
    assert resumo["total_vendas"] == Decimal("27.00") + arroz.preco_venda
    assert resumo["ticket_medio"] == (resumo["total_vendas"] / 2).quantize(Decimal("0.01"))
    assert resumo["mais_vendidos"][0] == {"nome_produto": "Refrigerante Cola 2L", "quantidade": Decimal("3")}


def test_caixa_registra_venda_pela_api(client, login, loja_demo, criar_funcionario):
    criar_funcionario(loja_demo, email="caixa@mercado.com", senha="caixa123")
    headers = login("caixa@mercado.com", "caixa123")
    produtos = client.get(f"{API}/produtos", headers=headers, params={"busca": "Refrigerante"}).json()
    produto_id = produtos["items"][0]["id"]

    resp = client.post(f"{API}/vendas", headers=headers, json={
        "itens": [{"produto_id": produto_id, "quantidade": 2}],
        "forma_pagamento": "DINHEIRO",
    })

    assert resp.status_code == 201, resp.text
    assert Decimal(str(resp.json()["valor_final"])) == Decimal("18.00")
    assert client.get(f"{API}/vendas/{resp.json()['id']}", headers=headers).status_code == 200
    assert len(client.get(f"{API}/vendas", headers=headers).json()) == 1
    assert client.get(f"{API}/vendas/resumo", headers=headers).json()["quantidade_vendas"] == 1
    produto = client.get(f"{API}/produtos/{produto_id}", headers=headers).json()
    assert Decimal(str(produto["estoque"])) == Decimal("148")


def test_venda_com_produto_inexistente_404(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    resp = client.post(f"{API}/vendas", headers=headers, json={
        "itens": [{"produto_id": 9999, "quantidade": 1}],
        "forma_pagamento": "PIX",
    })

    assert resp.status_code == 404
