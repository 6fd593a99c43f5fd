import json
import unittest
from decimal import Decimal

from vitrine.core.cart import CartStore
from vitrine.core.money import Money
from vitrine.core.tests.fakes import ArmazenamentoEmMemoria, produto


class TestCartStore(unittest.TestCase):

    def setUp(self):
        """
        Prepara um carrinho vazio sobre um armazenamento em memória,
        que faz o papel do cookie de sessão do navegador.
        """
        self.storage = ArmazenamentoEmMemoria()
        self.carrinho = CartStore(self.storage)
        self.anel = produto(id=1, preco='59.90')
        self.colar = produto(id=2, preco='120.00')

    def test_adicionar_produto_novo(self):
        # ACT
        self.carrinho.add_item(self.anel, 2)

        # ASSERT
        self.assertEqual(len(self.carrinho.items), 1)
        self.assertEqual(self.carrinho.items[0].product, self.anel)
        self.assertEqual(self.carrinho.items[0].quantity, 2)
        self.assertIn(CartStore.DEFAULT_STORAGE_KEY, self.storage.dados)

    def test_adicionar_produto_existente_acumula(self):
        """
        Cenário: adicionar de novo o mesmo produto soma a quantidade
        em vez de criar uma segunda linha.
        """
        self.carrinho.add_item(self.anel, 2)
        self.carrinho.add_item(self.anel, 3)

        self.assertEqual(len(self.carrinho.items), 1)
        self.assertEqual(self.carrinho.items[0].quantity, 5)

    def test_adicionar_limita_em_99(self):
        self.carrinho.add_item(self.anel, 90)
        self.carrinho.add_item(self.anel, 20)
        self.assertEqual(self.carrinho.items[0].quantity, 99)

    def test_adicionar_quantidade_invalida_vira_um(self):
        self.carrinho.add_item(self.anel, 0)
        self.assertEqual(self.carrinho.items[0].quantity, 1)

    def test_adicionar_quantidade_negativa_nao_diminui_linha(self):
        """
        Cenário: a linha tem 10 unidades e chega um add com -50.
        Adicionar só pode aumentar; o valor inválido conta como 1.
        """
        self.carrinho.add_item(self.anel, 10)

        self.carrinho.add_item(self.anel, -50)

        self.assertEqual(self.carrinho.items[0].quantity, 11)

    def test_ordem_de_insercao_preservada(self):
        self.carrinho.add_item(self.colar)
        self.carrinho.add_item(self.anel)
        self.carrinho.add_item(self.colar)

        self.assertEqual([item.product.id for item in self.carrinho.items], [2, 1])

    def test_atualizar_quantidade_limita_sem_remover(self):
        """
        Cenário: 0 e 150 são limitados ao intervalo [1, 99]; o item continua no carrinho.
        """
        self.carrinho.add_item(self.anel, 5)

        self.carrinho.update_quantity(self.anel.id, 0)
        self.assertEqual(self.carrinho.items[0].quantity, 1)

        self.carrinho.update_quantity(self.anel.id, 150)
        self.assertEqual(self.carrinho.items[0].quantity, 99)

        self.carrinho.update_quantity(self.anel.id, -3)
        self.assertEqual(len(self.carrinho.items), 1)
        self.assertEqual(self.carrinho.items[0].quantity, 1)

    def test_atualizar_produto_ausente_nao_faz_nada(self):
        self.carrinho.update_quantity(42, 3)

        self.assertTrue(self.carrinho.is_empty())
        self.assertEqual(self.storage.dados, {})

    def test_remover_item(self):
        self.carrinho.add_item(self.anel)
        self.carrinho.add_item(self.colar)

        self.carrinho.remove_item(self.anel.id)
        self.carrinho.remove_item(999)

        self.assertEqual([item.product.id for item in self.carrinho.items], [2])

    def test_limpar_esvazia_e_apaga_armazenamento(self):
        self.carrinho.add_item(self.anel)
        id_anterior = self.carrinho.cart_id

        self.carrinho.clear()

        self.assertTrue(self.carrinho.is_empty())
        self.assertEqual(self.storage.dados, {})
        self.assertNotEqual(self.carrinho.cart_id, id_anterior)

    def test_total_de_itens(self):
        self.assertEqual(self.carrinho.get_total_items(), 0)

        self.carrinho.add_item(self.anel, 2)
        self.carrinho.add_item(self.colar, 3)

        self.assertEqual(self.carrinho.get_total_items(), 5)

    def test_subtotal_vazio_e_zero(self):
        self.assertEqual(self.carrinho.get_subtotal(), Money.zero())

    def test_subtotal_soma_exata_e_arredonda_no_final(self):
        """
        Cenário: 3 x 0.333 = 0.999 e 3 x 0.335 = 1.005.
        Arredondando por linha daria 1.00 + 1.01 = 2.01; somando antes dá 2.004 -> 2.00.
        """
        self.carrinho.add_item(produto(id=1, preco='0.333'), 3)
        self.carrinho.add_item(produto(id=2, preco='0.335'), 3)

        self.assertEqual(self.carrinho.get_subtotal().amount, Decimal('2.00'))
        self.assertEqual(self.carrinho.line_total(1), Money.of('1.00'))
        self.assertEqual(self.carrinho.line_total(2), Money.of('1.01'))
        self.assertIsNone(self.carrinho.line_total(3))

    def test_subtotal_igual_soma_das_linhas(self):
        self.carrinho.add_item(self.anel, 3)
        self.carrinho.add_item(self.colar, 2)

        esperado = sum((item.product.price * item.quantity for item in self.carrinho.items), Money.zero())
        self.assertEqual(self.carrinho.get_subtotal(), esperado.round2())
        self.assertEqual(self.carrinho.get_subtotal(), Money.of('419.70'))

    def test_snapshot_e_independente(self):
        self.carrinho.add_item(self.anel, 2)
        copia = self.carrinho.snapshot()

        self.carrinho.update_quantity(self.anel.id, 7)

        self.assertEqual(copia[0].quantity, 2)


class TestCartStorePersistencia(unittest.TestCase):

    def test_carrinho_sobrevive_a_recarga(self):
        """
        Cenário: um novo CartStore sobre o mesmo armazenamento (página recarregada)
        enxerga o mesmo carrinho.
        """
        storage = ArmazenamentoEmMemoria()
        primeiro = CartStore(storage)
        primeiro.add_item(produto(id=1, preco='59.90', categoria='Anéis'), 2)

        recarregado = CartStore(storage)

        self.assertEqual(recarregado.cart_id, primeiro.cart_id)
        self.assertEqual(recarregado.items[0].quantity, 2)
        self.assertEqual(recarregado.items[0].product.price, Money.of('59.90'))
        self.assertEqual(recarregado.items[0].product.category, 'Anéis')

    def test_json_corrompido_vira_carrinho_vazio(self):
        storage = ArmazenamentoEmMemoria({CartStore.DEFAULT_STORAGE_KEY: '{nao e json'})

        with self.assertLogs('vitrine.core.cart', level='WARNING'):
            carrinho = CartStore(storage)

        self.assertTrue(carrinho.is_empty())

    def test_dados_fora_do_intervalo_sao_saneados(self):
        dados = {
            'id': 'abc',
            'items': [
                {'product': {'id': 1, 'name': 'Anel', 'price': '10.00'}, 'quantity': 500},
                {'product': {'id': 1, 'name': 'Anel', 'price': '10.00'}, 'quantity': 3},
                {'product': {'id': 2, 'name': 'Colar', 'price': '5.00'}, 'quantity': 0},
            ],
        }
        storage = ArmazenamentoEmMemoria({'carrinho': json.dumps(dados)})

        carrinho = CartStore(storage, storage_key='carrinho')

        self.assertEqual(carrinho.cart_id, 'abc')
        self.assertEqual([(i.product.id, i.quantity) for i in carrinho.items], [(1, 99), (2, 1)])
