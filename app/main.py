import sys
import os
import logging
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cart_core.cart import Cart, CartState
from cart_core.errors import ValidationError
from cart_core.money import Money
from cart_core.settings import load_settings, configure_logging
from cart_core.transforms import load_catalog, find_product
from Checkout_Service.receipt import describe_condition, receipt_summary

logger = logging.getLogger(__name__)


# ============ Настройки и данные ============
@st.cache_resource
def get_settings():
    settings = load_settings()
    configure_logging(settings)
    return settings


@st.cache_data
def get_catalog(path: str):
    return load_catalog(path)


st.set_page_config(
    page_title="Shopping Cart",
    page_icon="🛒",
    layout="wide",
    initial_sidebar_state="expanded",
)

settings = get_settings()
catalog = get_catalog(settings.catalog_path)

# Своя корзина на каждую сессию браузера
if "cart" not in st.session_state:
    st.session_state.cart = Cart()

if "last_receipt" not in st.session_state:
    st.session_state.last_receipt = None


def render_receipt(receipt: dict) -> None:
    for line in receipt["lines"]:
        cols = st.columns([5, 1, 2, 3])
        with cols[0]:
            st.write(f"**{line['title']}**")
        with cols[1]:
            st.write(f"× {line['quantity']}")
        with cols[2]:
            st.write(Money(line["total"]).format())
        with cols[3]:
            if line["applied"]:
                st.caption(f"🏷️ {line['applied']} (−{Money(line['savings']).format()})")
    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        st.metric("💸 Экономия", receipt["savings_formatted"])
    with col2:
        st.metric("💰 Итого", receipt["formatted"])


# ============ HEADER ============
st.title("🛒 Корзина со скидками")

with st.sidebar:
    st.header("📂 Навигация")
    page = st.radio(
        "Выберите раздел:",
        ["🏪 Каталог", "🛒 Корзина"],
        label_visibility="collapsed",
    )
    st.divider()
    cart = st.session_state.cart
    st.metric("Позиций в корзине", len(cart))
    st.metric("Итого", cart.get_total().format())


# ============ PAGE: КАТАЛОГ ============
if page == "🏪 Каталог":
    st.header("🏪 Каталог")

    titles = [product.title for product, _ in catalog]
    selected = st.selectbox("Товар", titles, key="catalog_product")
    entry = find_product(catalog, selected).to_either("Каталог пуст")

    if entry.is_left:
        st.warning(entry.value)
    else:
        product, offers = entry.value
        st.write(f"Цена: **{Money(product.price).format()}**")

        qty = st.number_input("Кол-во", min_value=1, value=1, key="catalog_qty")
        chosen = [
            offer
            for idx, offer in enumerate(offers)
            if st.checkbox(
                describe_condition(offer), value=True, key=f"offer_{product.title}_{idx}"
            )
        ]

        if st.button("➕ В корзину", type="primary"):
            try:
                item = st.session_state.cart.add(
                    {"product": product, "quantity": int(qty), "condition": chosen}
                )
            except ValidationError as e:
                st.error(f"❌ {e}")
            else:
                st.success(f"✅ {item.product.title} × {item.quantity}")


# ============ PAGE: КОРЗИНА ============
elif page == "🛒 Корзина":
    st.header("🛒 Ваша корзина")

    cart = st.session_state.cart

    if cart.state is CartState.EMPTY:
        st.info("🛍️ Корзина пуста. Перейдите в каталог!")
        if st.session_state.last_receipt:
            st.subheader("🧾 Последний чек")
            render_receipt(st.session_state.last_receipt)
    else:
        for item in cart.items:
            cols = st.columns([5, 1, 2, 1])
            with cols[0]:
                st.write(f"**{item.product.title}**")
                applied = describe_condition(item.applied_condition())
                if applied:
                    st.caption(f"🏷️ {applied}")
            with cols[1]:
                st.write(f"× {item.quantity}")
            with cols[2]:
                st.write(item.compute_total().format())
            with cols[3]:
                if st.button("🗑️", key=f"remove_{item.key}"):
                    cart.remove(item.product)
                    st.rerun()

        st.divider()
        summary = cart.summary()
        st.markdown(f"### 💰 Итого: **{summary['formatted']}**")

        if st.button("✅ Оформить заказ", type="primary", use_container_width=True):
            snapshot = cart.checkout()
            st.session_state.last_receipt = receipt_summary(snapshot)
            logger.info("Session checkout %s", snapshot["formatted"])
            st.balloons()
            st.rerun()
