# Copyright (c) arlotito. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for full license information.
