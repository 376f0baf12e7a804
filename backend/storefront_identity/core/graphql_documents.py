"""Storefront GraphQL Documents — request shapes for every identity query and mutation.

Invariants:
    - Field names are part of the remote wire contract; do not rename
    - Every mutation selects customerUserErrors { code field message }
      (cart mutations select userErrors, their remote name)
"""

CUSTOMER_ACCESS_TOKEN_CREATE = """
mutation customerAccessTokenCreate($input: CustomerAccessTokenCreateInput!) {
  customerAccessTokenCreate(input: $input) {
    customerUserErrors {
      code
      field
      message
    }
    customerAccessToken {
      accessToken
      expiresAt
    }
  }
}
"""

CUSTOMER_ACTIVATE = """
mutation customerActivate($id: ID!, $input: CustomerActivateInput!) {
  customerActivate(id: $id, input: $input) {
    customerAccessToken {
      accessToken
      expiresAt
    }
    customerUserErrors {
      code
      field
      message
    }
  }
}
"""

CUSTOMER_RECOVER = """
mutation customerRecover($email: String!) {
  customerRecover(email: $email) {
    customerUserErrors {
      code
      field
      message
    }
  }
}
"""

CUSTOMER_UPDATE = """
mutation customerUpdate($customerAccessToken: String!, $customer: CustomerUpdateInput!) {
  customerUpdate(customerAccessToken: $customerAccessToken, customer: $customer) {
    customerUserErrors {
      code
      field
      message
    }
  }
}
"""

CUSTOMER_ADDRESS_CREATE = """
mutation customerAddressCreate(
  $address: MailingAddressInput!
  $customerAccessToken: String!
) {
  customerAddressCreate(
    address: $address
    customerAccessToken: $customerAccessToken
  ) {
    customerAddress {
      id
    }
    customerUserErrors {
      code
      field
      message
    }
  }
}
"""

CUSTOMER_ADDRESS_UPDATE = """
mutation customerAddressUpdate(
  $address: MailingAddressInput!
  $customerAccessToken: String!
  $id: ID!
) {
  customerAddressUpdate(
    address: $address
    customerAccessToken: $customerAccessToken
    id: $id
  ) {
    customerUserErrors {
      code
      field
      message
    }
  }
}
"""

CUSTOMER_ADDRESS_DELETE = """
mutation customerAddressDelete($customerAccessToken: String!, $id: ID!) {
  customerAddressDelete(customerAccessToken: $customerAccessToken, id: $id) {
    customerUserErrors {
      code
      field
      message
    }
    deletedCustomerAddressId
  }
}
"""

CUSTOMER_DEFAULT_ADDRESS_UPDATE = """
mutation customerDefaultAddressUpdate(
  $addressId: ID!
  $customerAccessToken: String!
) {
  customerDefaultAddressUpdate(
    addressId: $addressId
    customerAccessToken: $customerAccessToken
  ) {
    customerUserErrors {
      code
      field
      message
    }
  }
}
"""

CART_BUYER_IDENTITY_UPDATE = """
mutation cartBuyerIdentityUpdate($cartId: ID!, $buyerIdentity: CartBuyerIdentityInput!) {
  cartBuyerIdentityUpdate(cartId: $cartId, buyerIdentity: $buyerIdentity) {
    cart {
      id
      buyerIdentity {
        email
        customer {
          id
        }
      }
    }
    userErrors {
      code
      field
      message
    }
  }
}
"""

CUSTOMER_QUERY = """
query CustomerDetails($customerAccessToken: String!) {
  customer(customerAccessToken: $customerAccessToken) {
    id
    firstName
    lastName
    phone
    email
    defaultAddress {
      id
      formatted
      firstName
      lastName
      company
      address1
      address2
      country
      province
      city
      zip
      phone
    }
    addresses(first: 6) {
      edges {
        node {
          id
          formatted
          firstName
          lastName
          company
          address1
          address2
          country
          province
          city
          zip
          phone
        }
      }
    }
  }
}
"""

SHOP_PRIMARY_DOMAIN_QUERY = """
query getShopPrimaryDomain { shop { primaryDomain { url } } }
"""

CART_CREATE = """
mutation cartCreate($input: CartInput!) {
  cartCreate(input: $input) {
    cart {
      id
      buyerIdentity {
        email
        customer {
          id
        }
      }
    }
    userErrors {
      code
      field
      message
    }
  }
}
"""
