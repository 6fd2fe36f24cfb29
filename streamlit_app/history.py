"""Order history view."""

import streamlit as st

from miniapp_order.controller import OrderController
from miniapp_order.services.history_service import status_label


def render_history(controller: OrderController) -> None:
    st.subheader("Order history")
    if st.button("← Back to ordering"):
        controller.back_to_order()
        st.rerun()

    start_date = st.date_input("From", value=controller.history_start)
    end_date = st.date_input("To", value=controller.history_end)

    if st.button("🔍 Find my orders", disabled=controller.is_searching):
        with st.spinner("Searching..."):
            controller.search_history(start_date, end_date)

    if not controller.has_searched:
        st.info("Choose a date range and search for your orders.")
        return
    if not controller.history:
        st.info("No orders found in this date range.")
        return

    for order in controller.history:
        with st.container(border=True):
            st.markdown(f"**Order {order.order_id}** · {status_label(order.status)}")
            created = order.created_at_time
            st.write(f"Created: {created:%Y/%m/%d %H:%M}" if created is not None else f"Created: {order.created_at}")
            st.write(f"Pickup time: {order.pickup_time}")
            st.write(f"Items: {order.items}")
            st.write(f"Total: ${order.total_amount}")
            if order.delivery_address:
                st.write(f"Delivery address: {order.delivery_address}")
            if order.notes:
                st.write(f"Notes: {order.notes}")
