"""Streamlit entry point for the mini-app ordering flow."""

import streamlit as st

from miniapp_order.controller import OrderController, View
from miniapp_order.core.config import settings
from miniapp_order.services.order_form import date_options, time_options
from miniapp_order.services.order_service import build_share_text, format_pickup_display
from miniapp_order.utils.time import current_local_datetime
from streamlit_app.common import get_controller, render_notification, render_status
from streamlit_app.history import render_history

st.set_page_config(page_title=settings.app_name, layout="centered")
st.title(f"🍽️ {settings.shop_name}")


def render_login_redirect(controller: OrderController) -> None:
    provider = controller.gate.provider
    if provider is not None and getattr(provider, "login_requested", False):
        st.link_button("Continue to LINE login", settings.login_url)


def render_login_gate(controller: OrderController) -> None:
    session = controller.session
    render_status(session.status_message, session.status_level)
    render_login_redirect(controller)
    if session.can_login and st.button("Log in with LINE"):
        controller.login()
        st.rerun()


def render_menu(controller: OrderController) -> None:
    st.subheader("Menu")
    for item in controller.menu:
        quantity = controller.quantity_of(item.name)
        name_col, minus_col, qty_col, plus_col = st.columns([6, 1, 1, 1])
        name_col.markdown(f"{item.icon} **{item.name}** ${item.price} · {item.status.value}")
        if item.image:
            name_col.image(item.image, width=160)
        if minus_col.button("-", key=f"minus_{item.name}", disabled=quantity == 0):
            controller.change_quantity(item.name, -1)
            st.rerun()
        qty_col.write(quantity)
        if plus_col.button("+", key=f"plus_{item.name}", disabled=not item.is_available):
            controller.change_quantity(item.name, 1)
            st.rerun()


def render_cart(controller: OrderController) -> None:
    if not controller.cart:
        return
    st.subheader("Cart")
    for line in controller.cart.values():
        st.write(f"{line.icon} {line.name} × {line.quantity} = ${line.price * line.quantity}")
    confirmed = st.checkbox("I really want to empty the cart")
    if st.button("Clear cart", disabled=not confirmed):
        controller.clear_cart(confirmed=confirmed)
        st.rerun()


def render_form(controller: OrderController) -> None:
    form = controller.form
    now = current_local_datetime()
    st.subheader("Order details")
    st.text_input("Name", value=form.customer_name, disabled=True)
    form.customer_phone = st.text_input("Mobile phone", value=form.customer_phone, max_chars=10)
    if controller.validation.phone_error:
        st.error(controller.validation.phone_error)

    dates = date_options(now.date())
    date_values = [value for value, _ in dates]
    labels = dict(dates)
    date_index = date_values.index(form.pickup_date) if form.pickup_date in date_values else 0
    form.pickup_date = st.selectbox(
        "Pickup date", date_values, index=date_index, format_func=lambda value: labels[value]
    )
    slots = time_options()
    time_index = slots.index(form.pickup_time) if form.pickup_time in slots else 0
    form.pickup_time = st.selectbox(
        "Pickup time", slots, index=time_index, format_func=lambda value: value.strftime("%H:%M")
    )
    if controller.validation.time_error:
        st.error(controller.validation.time_error)

    form.delivery_address = st.text_input("Delivery address (leave empty for pickup)", value=form.delivery_address)
    form.notes = st.text_area("Notes", value=form.notes)

    totals = controller.totals
    st.write(f"Subtotal: ${totals.subtotal}")
    if totals.delivery_fee:
        st.write(f"Delivery fee: ${totals.delivery_fee}")
    st.markdown(f"**Total: ${totals.total}**")

    if st.button("✅ Submit order", disabled=controller.is_submitting):
        with st.spinner("Processing..."):
            controller.submit()
        st.rerun()


def render_success(controller: OrderController) -> None:
    order = controller.submitted_order
    if order is None:
        controller.back_to_order()
        st.rerun()
        return
    st.subheader("🎉 Order received")
    st.write(f"Order number: {order.order_id}")
    st.write(f"Customer: {order.customer_name}")
    st.write(f"Phone: {order.customer_phone}")
    st.write(f"Pickup time: {format_pickup_display(order.pickup_time)}")
    st.write(f"Fulfilment: {'Delivery' if order.delivery_address else 'Pickup'}")
    if order.delivery_address:
        st.write(f"Delivery address: {order.delivery_address}")
    if order.notes:
        st.write(f"Notes: {order.notes}")
    st.markdown(f"**Total: ${order.total_amount}**")
    st.code(build_share_text(order), language=None)
    if st.button("Place another order"):
        controller.new_order()
        st.rerun()


controller = get_controller()
render_notification(controller)

if controller.session.is_loading:
    st.info(controller.session.status_message)
    render_login_redirect(controller)
    st.stop()
if not controller.session.is_logged_in:
    render_login_gate(controller)
    st.stop()

render_status(controller.session.status_message, controller.session.status_level)

if controller.view is View.HISTORY:
    render_history(controller)
elif controller.view is View.SUCCESS:
    render_success(controller)
else:
    if st.button("🕒 Order history"):
        controller.show_history()
        st.rerun()
    render_menu(controller)
    render_cart(controller)
    render_form(controller)
