from decimal import Decimal

API = "/api/v1"

NFE_MINIMA = """<nfeProc xmlns="http://www.portalfiscal.inf.br/nfe"><NFe><infNFe>
  <emit><CNPJ>11111111000111</CNPJ><xNome>Dist X</xNome></emit>
  <det nItem="1"><prod><cProd></cProd><xProd>Refrigerante Cola 2L</xProd>
    <uCom>UN</uCom><qCom>24</qCom><vUnCom>5.80</vUnCom></prod></det>
  <det nItem="2"><prod><cProd>CAF01</cProd><xProd>Café 500g</xProd>
    <uCom>UN</uCom><qCom>10</qCom><vUnCom>12.00</vUnCom></prod></det>
</infNFe></NFe></nfeProc>"""


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_rota_protegida_sem_token(client):
    resp = client.get(f"{API}/produtos")

    assert resp.status_code == 401


def test_token_invalido(client):
    resp = client.get(f"{API}/produtos", headers={"Authorization": "Bearer nao-e-um-jwt"})

    assert resp.status_code == 401


def test_login_devolve_token_bearer(client, loja_demo):
    resp = client.post(f"{API}/auth/login", json={"email": "joao@mercado.com", "senha": "123456"})

    assert resp.status_code == 200
    dados = resp.json()
    assert dados["token_type"] == "bearer"
    assert dados["access_token"]
    assert dados["user"]["perfil"] == "Gerente"
    assert dados["user"]["tenant_id"] == loja_demo.id


def test_login_invalido_401(client, loja_demo):
    resp = client.post(f"{API}/auth/login", json={"email": "joao@mercado.com", "senha": "errada"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Credenciais inválidas"


def test_me(client, login):
    headers = login("master@varejo.com", "123456")

    resp = client.get(f"{API}/auth/me", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["perfil"] == "Master"
    assert resp.json()["tenant_id"] is None


def test_gerente_com_troca_pendente_recebe_403_ate_trocar(client, login, criar_tenant):
    criar_tenant("nova@loja.com", "temp1234", deve_trocar_senha=True)
    headers = login("nova@loja.com", "temp1234")

    assert client.get(f"{API}/produtos", headers=headers).status_code == 403
    assert client.get(f"{API}/equipe", headers=headers).status_code == 403

    resp = client.post(
        f"{API}/auth/alterar-senha",
        json={"senha_atual": "temp1234", "nova_senha": "definitiva"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["deve_trocar_senha"] is False

    # Mesmo token: a liberação vem do banco
    assert client.get(f"{API}/produtos", headers=headers).status_code == 200


def test_alterar_senha_erros(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    fraca = client.post(f"{API}/auth/alterar-senha",
                        json={"senha_atual": "123456", "nova_senha": "123"}, headers=headers)
    errada = client.post(f"{API}/auth/alterar-senha",
                         json={"senha_atual": "xxxxxx", "nova_senha": "novaSenha"}, headers=headers)

    assert fraca.status_code == 400
    assert errada.status_code == 400


def test_senha_multibyte_acima_do_limite_do_bcrypt_422(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")
    longa = "ç" * 40

    troca = client.post(f"{API}/auth/alterar-senha",
                        json={"senha_atual": "123456", "nova_senha": longa}, headers=headers)
    operador = client.post(f"{API}/equipe", headers=headers,
                           json={"nome": "Carlos", "email": "carlos@mercado.com", "senha": longa})

    assert troca.status_code == 422
    assert operador.status_code == 422
    assert client.post(f"{API}/auth/login",
                       json={"email": "joao@mercado.com", "senha": "123456"}).status_code == 200


def test_master_cria_tenant_com_senha_temporaria(client, login, plano):
    headers = login("master@varejo.com", "123456")

    resp = client.post(f"{API}/tenants", headers=headers, json={
        "nome_empresa": "Padaria Pão Quente",
        "nome_responsavel": "Ana Lima",
        "email": "ana@padaria.com",
        "documento": "98.765.432/0001-10",
        "plano_id": plano.id,
    })

    assert resp.status_code == 201, resp.text
    dados = resp.json()
    assert dados["tenant"]["deve_trocar_senha"] is True
    assert Decimal(str(dados["tenant"]["mensalidade"])) == Decimal("49.90")

    login_gerente = client.post(f"{API}/auth/login",
                                json={"email": "ana@padaria.com", "senha": dados["senha_temporaria"]})
    assert login_gerente.status_code == 200
    assert login_gerente.json()["user"]["deve_trocar_senha"] is True


def test_master_cria_tenant_com_plano_inexistente(client, login):
    headers = login("master@varejo.com", "123456")

    resp = client.post(f"{API}/tenants", headers=headers, json={
        "nome_empresa": "Loja Y",
        "nome_responsavel": "Fulano",
        "email": "y@loja.com",
        "documento": "98.765.432/0001-10",
        "plano_id": "nao_existe",
    })

    assert resp.status_code == 404


def test_master_reseta_senha_do_tenant(client, login, loja_demo):
    headers = login("master@varejo.com", "123456")

    resp = client.post(f"{API}/tenants/{loja_demo.id}/resetar-senha", headers=headers)

    assert resp.status_code == 200
    temporaria = resp.json()["senha_temporaria"]
    novo = client.post(f"{API}/auth/login", json={"email": "joao@mercado.com", "senha": temporaria})
    assert novo.json()["user"]["deve_trocar_senha"] is True
    antigo = client.post(f"{API}/auth/login", json={"email": "joao@mercado.com", "senha": "123456"})
    assert antigo.status_code == 401


def test_resetar_senha_tenant_inexistente_404(client, login):
    headers = login("master@varejo.com", "123456")

    assert client.post(f"{API}/tenants/9999/resetar-senha", headers=headers).status_code == 404


def test_rotas_de_tenants_exigem_master(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    assert client.get(f"{API}/tenants", headers=headers).status_code == 403


def test_gerente_cadastra_operador_que_consegue_logar(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    resp = client.post(f"{API}/equipe", headers=headers,
                       json={"nome": "Carlos", "email": "carlos@mercado.com", "senha": "caixa123"})
    assert resp.status_code == 201, resp.text

    operador = client.post(f"{API}/auth/login", json={"email": "carlos@mercado.com", "senha": "caixa123"})
    assert operador.json()["user"]["perfil"] == "Operador"

    client.post(f"{API}/equipe/{resp.json()['id']}/desativar", headers=headers)
    desativado = client.post(f"{API}/auth/login", json={"email": "carlos@mercado.com", "senha": "caixa123"})
    assert desativado.status_code == 401


def test_operador_desativado_perde_acesso_com_token_antigo(client, login, loja_demo):
    gerente = login("joao@mercado.com", "123456")
    criado = client.post(f"{API}/equipe", headers=gerente,
                         json={"nome": "Carlos", "email": "carlos@mercado.com", "senha": "caixa123"})
    operador = login("carlos@mercado.com", "caixa123")
    nota = {
        "fornecedor": {"nome": "Dist X", "documento": "111"},
        "itens": [{"nome": "Refrigerante Cola 2L", "quantidade": 1, "preco_unitario": 5}],
    }
    assert client.post(f"{API}/produtos/importar", headers=operador, json=nota).status_code == 200

    client.post(f"{API}/equipe/{criado.json()['id']}/desativar", headers=gerente)

    resp = client.post(f"{API}/produtos/importar", headers=operador, json=nota)
    assert resp.status_code == 401
    assert client.get(f"{API}/produtos", headers=operador).status_code == 401


def test_loja_removida_revoga_tokens_do_gerente_e_operadores(client, login, loja_demo, criar_funcionario):
    criar_funcionario(loja_demo, email="caixa@mercado.com", senha="caixa123")
    gerente = login("joao@mercado.com", "123456")
    operador = login("caixa@mercado.com", "caixa123")
    master = login("master@varejo.com", "123456")

    assert client.delete(f"{API}/tenants/{loja_demo.id}", headers=master).status_code == 204

    assert client.get(f"{API}/produtos", headers=gerente).status_code == 401
    assert client.get(f"{API}/produtos", headers=operador).status_code == 401


def test_importar_nfe_via_upload(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    resp = client.post(
        f"{API}/produtos/importar-nfe",
        headers=headers,
        files={"arquivo": ("nota.xml", NFE_MINIMA.encode("utf-8"), "application/xml")},
    )

    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "fornecedor_id": resp.json()["fornecedor_id"],
        "fornecedor_criado": True,
        "produtos_atualizados": 1,
        "produtos_criados": 1,
    }

    produtos = client.get(f"{API}/produtos", headers=headers, params={"busca": "Refrigerante"}).json()
    assert Decimal(str(produtos["items"][0]["estoque"])) == Decimal("174")


def test_preview_nao_grava(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    resp = client.post(
        f"{API}/produtos/importar-nfe/preview",
        headers=headers,
        files={"arquivo": ("nota.xml", NFE_MINIMA.encode("utf-8"), "application/xml")},
    )

    assert resp.status_code == 200
    assert resp.json()["fornecedor"]["documento"] == "11111111000111"
    assert client.get(f"{API}/fornecedores", headers=headers).json()["total"] == 0


def test_importar_xml_invalido_400(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    resp = client.post(
        f"{API}/produtos/importar-nfe",
        headers=headers,
        files={"arquivo": ("nota.xml", b"<NFe>", "application/xml")},
    )

    assert resp.status_code == 400


def test_importar_payload_json_com_quantidade_negativa_422(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")

    resp = client.post(f"{API}/produtos/importar", headers=headers, json={
        "fornecedor": {"nome": "Dist X", "documento": "111"},
        "itens": [{"nome": "Refrigerante Cola 2L", "quantidade": -1, "preco_unitario": 5}],
    })

    assert resp.status_code == 422


def test_estoque_baixo(client, login, loja_demo):
    headers = login("joao@mercado.com", "123456")
    client.post(f"{API}/produtos", headers=headers, json={
        "codigo": "SAL01", "nome": "Sal 1kg", "preco_custo": "1.00", "preco_venda": "2.00",
        "estoque": "2", "estoque_minimo": "5",
    })

    resp = client.get(f"{API}/produtos", headers=headers, params={"estoque_baixo": True})

    assert [p["codigo"] for p in resp.json()["items"]] == ["SAL01"]


def test_master_gerencia_planos(client, login):
    headers = login("master@varejo.com", "123456")

    criado = client.post(f"{API}/planos", headers=headers, json={
        "id": "plan_basico", "nome": "Básico", "limite_produtos": 100,
        "limite_usuarios": 1, "taxa_suporte": "59.90", "recursos": ["Estoque"],
    })
    assert criado.status_code == 201, criado.text

    duplicado = client.post(f"{API}/planos", headers=headers, json={"id": "plan_basico", "nome": "Outro"})
    assert duplicado.status_code == 400

    atualizado = client.put(f"{API}/planos/plan_basico", headers=headers, json={"nome": "Básico Plus"})
    assert atualizado.json()["nome"] == "Básico Plus"
    assert atualizado.json()["limite_produtos"] == 100

    assert client.delete(f"{API}/planos/plan_basico", headers=headers).status_code == 204
    assert client.get(f"{API}/planos", headers=headers).json() == []


def test_plano_com_lojas_nao_pode_ser_removido(client, login, loja_demo):
    headers = login("master@varejo.com", "123456")

    assert client.delete(f"{API}/planos/plan_demo", headers=headers).status_code == 400


def test_master_bloqueia_e_remove_tenant(client, login, loja_demo):
    headers = login("master@varejo.com", "123456")

    bloqueado = client.patch(f"{API}/tenants/{loja_demo.id}", headers=headers, json={"status": "Blocked"})
    assert bloqueado.status_code == 200
    assert bloqueado.json()["status"] == "Blocked"

    assert client.delete(f"{API}/tenants/{loja_demo.id}", headers=headers).status_code == 204
    assert client.get(f"{API}/tenants", headers=headers).json()["total"] == 0
    login_removido = client.post(f"{API}/auth/login", json={"email": "joao@mercado.com", "senha": "123456"})
    assert login_removido.status_code == 401
